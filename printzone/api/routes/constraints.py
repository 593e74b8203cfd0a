"""Constraint routes.

Stateless wrappers over the ConstraintEngine: the caller sends the element,
the region and the live viewport with every request and gets back the legal
element.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from printzone.api.config import get_settings
from printzone.constraints.engine import ConstraintEngine
from printzone.constraints.mapping import resolve_scale
from printzone.dsl.schema import Delimitation, DesignElement, TextElement, Viewport

router = APIRouter()


@lru_cache()
def get_engine() -> ConstraintEngine:
    """Engine configured from settings."""
    return ConstraintEngine(get_settings().tuning())


class RegionContext(BaseModel):
    """Viewport and region shared by every constraint request."""
    viewport: Viewport
    delimitation: Optional[Delimitation] = None


class ScaleRequest(RegionContext):
    """Request to map a delimitation into viewport pixels."""


class ScaleResponse(BaseModel):
    """Scale factors and pixel bounds."""
    scale_x: float
    scale_y: float
    x: float
    y: float
    width: float
    height: float


class TranslateRequest(RegionContext):
    """Request to move an element."""
    element: DesignElement
    x: float = Field(description="Requested center X as a viewport fraction")
    y: float = Field(description="Requested center Y as a viewport fraction")


class ResizeRequest(RegionContext):
    """Request to resize an element."""
    element: DesignElement
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    aspect_ratio: Optional[float] = Field(default=None, gt=0)


class RotateRequest(RegionContext):
    """Request to rotate an element."""
    element: DesignElement
    rotation: float


class CurveRequest(RegionContext):
    """Request to bend a text element."""
    element: DesignElement
    curve: float


class ValidateRequest(RegionContext):
    """Request to check an element's containment."""
    element: DesignElement


class ElementResponse(BaseModel):
    """Constrained element."""
    element: DesignElement
    at_boundary: bool = False


class ViolationResponse(BaseModel):
    """A containment violation."""
    rule: str
    message: str
    severity: str
    edges: list[str]


class ValidateResponse(BaseModel):
    """Containment report."""
    is_valid: bool
    violations: list[ViolationResponse]


@router.post("/scale", response_model=ScaleResponse)
async def scale(request: ScaleRequest):
    """Map the delimitation into viewport pixels."""
    mapped = resolve_scale(request.viewport, request.delimitation)
    if mapped is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A delimitation and a non-empty viewport are required",
        )
    return ScaleResponse(
        scale_x=mapped.scale_x,
        scale_y=mapped.scale_y,
        x=mapped.bounds.x,
        y=mapped.bounds.y,
        width=mapped.bounds.width,
        height=mapped.bounds.height,
    )


@router.post("/translate", response_model=ElementResponse)
async def translate(request: TranslateRequest, engine: ConstraintEngine = Depends(get_engine)):
    """Move an element as far toward the requested center as the region allows."""
    element = engine.move(request.element, request.x, request.y, request.viewport, request.delimitation)
    return ElementResponse(element=element)


@router.post("/resize", response_model=ElementResponse)
async def resize(request: ResizeRequest, engine: ConstraintEngine = Depends(get_engine)):
    """Resize an element about its center within the region."""
    element, at_boundary = engine.resize(
        request.element,
        request.width,
        request.height,
        request.viewport,
        request.delimitation,
        request.aspect_ratio,
    )
    return ElementResponse(element=element, at_boundary=at_boundary)


@router.post("/rotate", response_model=ElementResponse)
async def rotate(request: RotateRequest, engine: ConstraintEngine = Depends(get_engine)):
    """Rotate an element as far toward the requested angle as the region allows."""
    element = engine.rotate(request.element, request.rotation, request.viewport, request.delimitation)
    return ElementResponse(element=element)


@router.post("/curve", response_model=ElementResponse)
async def curve(request: CurveRequest, engine: ConstraintEngine = Depends(get_engine)):
    """Bend a text element as far toward the requested curvature as the region allows."""
    if not isinstance(request.element, TextElement):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only text elements can be curved",
        )
    element = engine.set_curve(request.element, request.curve, request.viewport, request.delimitation)
    return ElementResponse(element=element)


@router.post("/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest, engine: ConstraintEngine = Depends(get_engine)):
    """Report whether an element's footprint stays inside the region."""
    result = engine.validate(request.element, request.viewport, request.delimitation)
    return ValidateResponse(
        is_valid=result.is_valid,
        violations=[
            ViolationResponse(
                rule=v.rule,
                message=v.message,
                severity=v.severity,
                edges=v.edges,
            )
            for v in result.violations
        ],
    )
