# routers/projects.py

from core.collection_router import CollectionSpec, build_collection_router
from models.enums import FeatureArea
from models.project import ProjectCreate, ProjectUpdate


PROJECTS = CollectionSpec(
    collection="projects",
    area=FeatureArea.projects,
    label="Project",
    create_model=ProjectCreate,
    update_model=ProjectUpdate,
    default_now=("startDate", "endDate"),
)

router = build_collection_router(PROJECTS)
