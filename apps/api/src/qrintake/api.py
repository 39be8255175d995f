from fastapi import APIRouter

from qrintake.modules.catalogs import router as catalogs_router
from qrintake.modules.geofence import router as geofence_router
from qrintake.modules.notifications import router as notifications_router
from qrintake.modules.qr_codes import router as qr_codes_router
from qrintake.modules.submissions import form_router, router as submissions_router

api_router = APIRouter()

api_router.include_router(qr_codes_router, prefix="/qrcodes", tags=["QR Codes"])

api_router.include_router(form_router, prefix="/form", tags=["Form Submission"])

api_router.include_router(submissions_router, prefix="/submissions", tags=["Submissions"])

api_router.include_router(geofence_router, prefix="/locations", tags=["Locations"])

api_router.include_router(catalogs_router, prefix="/catalogs", tags=["Catalogs"])

api_router.include_router(
    notifications_router, prefix="/notifications", tags=["Notifications"]
)
