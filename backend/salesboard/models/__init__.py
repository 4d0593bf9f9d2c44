# Import models here so Alembic can discover metadata.
from salesboard.models.profile import Profile  # noqa: F401

# Records owned by a profile
from salesboard.models.meeting import Meeting  # noqa: F401
from salesboard.models.offer import Offer  # noqa: F401
from salesboard.models.sale import Sale, SaleService  # noqa: F401
from salesboard.models.booking import Booking  # noqa: F401

from salesboard.models.service import Service  # noqa: F401
