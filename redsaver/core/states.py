from typing import Literal

Role = Literal["donor", "admin"]
DonationStatus = Literal["pending", "inprogress", "done", "canceled"]

DEFAULT_ROLE = "donor"
DEFAULT_USER_STATUS = "active"
DEFAULT_DONATION_STATUS = "pending"
