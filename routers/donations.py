# routers/donations.py

from core.collection_router import CollectionSpec, build_collection_router
from models.donation import DonationCreate, DonationUpdate
from models.enums import FeatureArea


DONATIONS = CollectionSpec(
    collection="donations",
    area=FeatureArea.donations,
    label="Donation",
    create_model=DonationCreate,
    update_model=DonationUpdate,
    default_now=("date",),
    audit=True,
    create_action="Donation Received",
)

router = build_collection_router(DONATIONS)
