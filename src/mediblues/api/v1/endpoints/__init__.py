"""API v1 endpoints package."""

from . import (
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

__all__ = [
	"appointments",
	"auth",
	"banners",
	"contacts",
	"departments",
	"doctors",
	"health",
	"locations",
	"packages",
	"statistics",
]
