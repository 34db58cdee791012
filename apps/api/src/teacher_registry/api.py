from fastapi import APIRouter, Depends

from teacher_registry.core.rate_limit import enforce_client_rate_limit
from teacher_registry.modules.forms import admin_router as forms_admin_router
from teacher_registry.modules.forms import router as forms_router
from teacher_registry.modules.reference_data import router as reference_data_router

api_router = APIRouter(dependencies=[Depends(enforce_client_rate_limit)])

api_router.include_router(reference_data_router, tags=["Reference Data"])

api_router.include_router(forms_router, tags=["Teacher Forms"])

api_router.include_router(forms_admin_router, tags=["Admin - Teacher Forms"])
