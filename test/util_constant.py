from datetime import date, time, timedelta
from decimal import Decimal


DEFAULT_PASSWORD = 'P@ssw0rd'

TEST_BUYER_EMAIL = 'buyer@test.com'
TEST_BUYER_NAME = 'Test Buyer'
ANOTHER_BUYER_EMAIL = 'another_buyer@test.com'
ANOTHER_BUYER_NAME = 'Another Buyer'
TEST_ADMIN_EMAIL = 'admin@test.com'
TEST_ADMIN_NAME = 'Test Admin'

# Catalog defaults: a 120 minute feature in a 5 x 8 hall
DEFAULT_MOVIE_TITLE = 'The Long Night'
DEFAULT_MOVIE_DURATION = 120
DEFAULT_THEATER_NAME = 'Hall 1'
DEFAULT_ROWS = 5
DEFAULT_SEATS_PER_ROW = 8
DEFAULT_PRICE = Decimal('12.99')
DEFAULT_SHOW_TIME = time(19, 0)

# Two seats at 12.99 plus the 1.50 booking fee
TWO_SEAT_TOTAL = Decimal('27.48')

PAYMENT_TOKEN = 'tok_visa'
DECLINED_PAYMENT_TOKEN = 'tok_chargeDeclined'


def tomorrow() -> date:
    return date.today() + timedelta(days=1)
