# Models package - database tables
from b2bee.models.bee import Bee
from b2bee.models.lead import Lead, LeadStatus
from b2bee.models.booking import Booking, BookingStatus
from b2bee.models.testimonial import Testimonial
from b2bee.models.abm import ABMPage, ABMMarinasPage
from b2bee.models.boat_fund import BoatFundContribution
