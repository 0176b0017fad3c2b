from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.paths_router import router as paths_router
from pathgraph.config import settings

app = FastAPI(
    title="Learning Path Graph Engine API",
    description="API for designing prerequisite-linked learning paths and laying them out.",
    version="1.0.0"
)

# The designer UI runs on its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(paths_router)

@app.get("/")
def read_root():
    return {"message": "Learning Path Graph Engine API is running."}
