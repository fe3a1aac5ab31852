# users and audit
from fred.models.users.user_models import User
from fred.models.support.activity_models import UserActivity

# purchasing
from fred.models.purchase_orders.purchase_order_models import PurchaseOrder
from fred.models.rentals.rental_models import Rental, RentalPO
