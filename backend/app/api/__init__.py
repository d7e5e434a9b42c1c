from fastapi import APIRouter

from .routes import auth, community, config, health, landmarks, media, stamp, tourist_spots

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(config.router, prefix="/config", tags=["config"])
api_router.include_router(landmarks.router, tags=["landmarks"])
api_router.include_router(media.router, tags=["media"])
api_router.include_router(community.router, prefix="/community", tags=["community"])
api_router.include_router(tourist_spots.router, prefix="/tourist-spots", tags=["tourist-spots"])
api_router.include_router(stamp.router, prefix="/stamp", tags=["stamp"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
