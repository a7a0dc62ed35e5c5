"""
BeFrames Compile HTTP Service

FastAPI-based HTTP service providing the following APIs:
- POST /jobs/compile - Compile job settings into render tasks
- GET  /job-types    - Job types and their submission defaults
- GET  /health       - Health check

The service is stateless: every request compiles from scratch and nothing is
kept after the response is sent.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .beframes.config import get_config
from .beframes.models import JobType
from .beframes.schemas import SceneContextModel, SettingsModel
from .beframes.submitter import compile_document

logger = logging.getLogger(__name__)


# Pydantic models for API
class CompileRequest(BaseModel):
    """Request body for compiling a job"""
    job_type: JobType = JobType.BLENDER_PATH
    job_name: str = ""
    blendfile: str = ""
    scene_context: Optional[SceneContextModel] = None
    settings: SettingsModel = Field(default_factory=SettingsModel)
    created: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        if self.scene_context is not None:
            return {
                "job_type": self.job_type.value,
                "job_name": self.job_name,
                "blendfile": self.blendfile,
                "scene_context": self.scene_context.model_dump(),
                "settings": self.settings.to_values(),
            }

        document = self.settings.to_values()
        document["job_type"] = self.job_type.value
        if self.job_name:
            document.setdefault("job_name", self.job_name)
        if self.blendfile:
            document.setdefault("blendfile", self.blendfile)
        return document


# Create FastAPI app
app = FastAPI(
    title="BeFrames Compile Service",
    description="HTTP API for compiling Blender render jobs into farm tasks",
    version=__version__,
)


# ============== Job APIs ==============

@app.post("/jobs/compile")
async def compile_job(request: CompileRequest):
    """
    Compile a job.

    Returns:
        200 with the compiled job
        422 if the settings violate a job type rule
    """
    result = compile_document(request.to_document(), get_config(), created=request.created)

    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail={"error": result.error, "hint": result.hint},
        )

    return result.job.to_dict()


@app.get("/job-types")
async def list_job_types():
    """List job types with their submission defaults."""
    return [
        {
            "name": t.value,
            "label": t.label,
            "description": t.description,
            "defaults": t.defaults(),
        }
        for t in JobType
    ]


# ============== Health Check ==============

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# ============== Entry point for standalone run ==============

def run_service(host: str = "0.0.0.0", port: int = 9200):
    """Run the service with uvicorn"""
    import uvicorn
    logger.info("Starting BeFrames compile service on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="BeFrames Compile Service")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=9200, help="Port to bind to")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    run_service(args.host, args.port)
