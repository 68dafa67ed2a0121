# routers/programs.py

from core.collection_router import CollectionSpec, build_collection_router
from models.enums import FeatureArea
from models.program import ProgramCreate, ProgramUpdate


PROGRAMS = CollectionSpec(
    collection="programs",
    area=FeatureArea.programs,
    label="Program",
    create_model=ProgramCreate,
    update_model=ProgramUpdate,
)

router = build_collection_router(PROGRAMS)
