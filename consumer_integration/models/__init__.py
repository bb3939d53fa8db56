from consumer_integration.models.order import Order
from consumer_integration.models.order_event import OrderEvent

# add ALL models here
