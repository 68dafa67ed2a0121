# routers/partners.py

from core.collection_router import CollectionSpec, build_collection_router
from models.enums import FeatureArea
from models.partner import PartnerCreate, PartnerUpdate


PARTNERS = CollectionSpec(
    collection="partners",
    area=FeatureArea.partners,
    label="Partner",
    create_model=PartnerCreate,
    update_model=PartnerUpdate,
)

router = build_collection_router(PARTNERS)
