# routers/beneficiaries.py

from core.collection_router import CollectionSpec, build_collection_router
from models.beneficiary import BeneficiaryCreate, BeneficiaryUpdate
from models.enums import FeatureArea


BENEFICIARIES = CollectionSpec(
    collection="beneficiaries",
    area=FeatureArea.beneficiaries,
    label="Beneficiary",
    create_model=BeneficiaryCreate,
    update_model=BeneficiaryUpdate,
)

router = build_collection_router(BENEFICIARIES)
