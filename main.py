import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import API_TITLE, API_VERSION, settings
from database import init_database
from routers import auth_router, beds_router, patients_router, users_router, vitals_router

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, seed the bed inventory and check for an admin account."""
    init_database()
    yield


app = FastAPI(title=API_TITLE, version=API_VERSION, lifespan=lifespan)


# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(beds_router.router)
app.include_router(patients_router.router)
app.include_router(vitals_router.router)


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Ward Management System API",
        "docs": "/docs",
        "endpoints": {
            "login": "POST /login",
            "register": "POST /users/register",
            "list_users": "GET /users",
            "delete_user": "DELETE /users/{id}",
            "list_beds": "GET /beds",
            "discharge": "POST /beds/discharge",
            "list_patients": "GET /patients",
            "admit_patient": "POST /patients",
            "patient_detail": "GET /patients/{id}",
            "latest_vitals": "GET /vitals/latest/{bedId}",
        },
    }


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
