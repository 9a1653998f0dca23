"""API v1 versioned router.

Router structure
----------------
PUBLIC (no auth):
  /health, /ready, /live        → health checks
  /auth/admin/login             → admin login, returns a JWT
  GET /locations, /departments, /doctors, /packages, /banners,
      /contact-info             → directory reads (enabled/active rows only)
  POST /appointments            → booking
  POST /contact                 → contact form

ADMIN (Bearer token; enforced per endpoint through the AdminUser dependency):
  /admin/*                      → list views including disabled/inactive rows,
                                  dashboard statistics
  POST/PATCH/DELETE on the directory resources
  GET/PATCH/DELETE /appointments
  /auth/admin/me
"""
from fastapi import APIRouter

from .endpoints import (
    appointments,
    auth,
    banners,
    contacts,
    departments,
    doctors,
    health,
    locations,
    packages,
    statistics,
)

router = APIRouter(prefix="/api/v1")

# =========================================================================
# Health and authentication
# =========================================================================

router.include_router(health.router, tags=["Health"])
router.include_router(auth.router)

# =========================================================================
# Directory resources. Public reads and admin writes share one router per
# resource; every write endpoint declares the AdminUser dependency.
# =========================================================================

router.include_router(locations.router)
router.include_router(departments.router)
router.include_router(doctors.router)
router.include_router(appointments.router)
router.include_router(packages.router)
router.include_router(banners.router)
router.include_router(contacts.router)

# =========================================================================
# Admin list views and dashboard
# =========================================================================

router.include_router(locations.admin_router)
router.include_router(departments.admin_router)
router.include_router(packages.admin_router)
router.include_router(banners.admin_router)
router.include_router(statistics.router)
