from .auth import AuthUrlResponse, LogoutResponse, VerifyResponse
from .community import CommentCreate, CommentOut, LikeToggle, PostCreate, PostOut
from .landmarks import Footprint, LandmarkInfo, LocateResponse, ResolvedLandmark
from .philosophy import LocationInfo, PhilosophyRequest, PhilosophyResponse, PhilosophySections
from .stamp import StampCard, StampCardList
from .tourism import TouristSpot
from .user import GoogleUser

__all__ = [
    "AuthUrlResponse",
    "LogoutResponse",
    "VerifyResponse",
    "CommentCreate",
    "CommentOut",
    "LikeToggle",
    "PostCreate",
    "PostOut",
    "Footprint",
    "LandmarkInfo",
    "LocateResponse",
    "ResolvedLandmark",
    "LocationInfo",
    "PhilosophyRequest",
    "PhilosophyResponse",
    "PhilosophySections",
    "StampCard",
    "StampCardList",
    "TouristSpot",
    "GoogleUser",
]
