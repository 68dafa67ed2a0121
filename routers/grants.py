# routers/grants.py

from core.collection_router import CollectionSpec, build_collection_router
from models.enums import FeatureArea
from models.grant import GrantCreate, GrantUpdate


GRANTS = CollectionSpec(
    collection="grants",
    area=FeatureArea.grants,
    label="Grant",
    create_model=GrantCreate,
    update_model=GrantUpdate,
    default_now=("startDate", "endDate"),
    audit=True,
)

router = build_collection_router(GRANTS)
