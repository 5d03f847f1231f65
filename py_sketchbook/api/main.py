"""FastAPI main application."""

import logging
from typing import List, Optional, Tuple

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import get_pattern, list_patterns, settings
from ..config.patterns import PatternSpec
from ..core.alea_prng import AleaPRNG
from ..core.geometry import Point, get_intersection_point
from ..core.room_generator import RoomConfig, RoomGenerator
from ..core.space_colonization import LEAF_MODES, Tree, TreeConfig, Venation

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Sketchbook API",
    description="Generative-art geometry: room partitions, space colonization and venation",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class PointModel(BaseModel):
    x: float
    y: float

    @classmethod
    def from_point(cls, p: Point) -> "PointModel":
        return cls(x=p.x, y=p.y)


class RoomRequest(BaseModel):
    """Request to partition a grid into rooms."""

    n: int = Field(10, description="Grid side length")
    unity: float = Field(0.5, description="Merge intensity in [0, 1]")
    quads_only: bool = Field(False, description="Only produce rectangular rooms")
    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")


class RoomModel(BaseModel):
    cells: List[Tuple[int, int]]
    min_r: int
    min_c: int
    max_r: int
    max_c: int


class RoomResponse(BaseModel):
    n: int
    merge_attempts: int
    merges: int
    rooms: List[RoomModel]


class TreeRequest(BaseModel):
    """Request to grow a space colonization tree."""

    origin: PointModel = Field(default_factory=lambda: PointModel(x=0, y=0))
    num_leaves: int = Field(500, ge=0)
    branch_length: float = Field(8)
    min_dist: float = Field(10, description="Leaf radius")
    wat: int = Field(0, ge=0)
    leaf_mode: str = Field("random", description=f"One of {LEAF_MODES}")
    shape_width: float = Field(90)
    width: float = Field(settings.canvas_width)
    height: float = Field(settings.canvas_height)
    center_origin: bool = True
    ticks: int = Field(100, ge=0, description="Growth ticks to run")
    seed: Optional[str] = None


class TreeResponse(BaseModel):
    branches: List[Tuple[PointModel, PointModel]]
    leaves: List[PointModel]


class VenationRequest(BaseModel):
    """Request to fill a polar border with venation."""

    branch_resolution: float = Field(4)
    branch_length: float = Field(15)
    origin: PointModel = Field(default_factory=lambda: PointModel(x=0, y=0))
    variance: float = Field(0)
    border: List[Tuple[float, float]] = Field(..., min_length=3, description="(theta, radius) pairs")
    ticks: int = Field(100, ge=0)
    seed: Optional[str] = None


class VenationResponse(BaseModel):
    branches: List[List[PointModel]]


class IntersectionRequest(BaseModel):
    line_a: Tuple[PointModel, PointModel]
    line_b: Tuple[PointModel, PointModel]


class IntersectionResponse(BaseModel):
    point: Optional[PointModel]


def _prng(seed: Optional[str]) -> AleaPRNG:
    return AleaPRNG(seed if seed is not None else settings.default_seed)


def _check_ticks(ticks: int) -> None:
    if ticks > settings.max_ticks:
        raise HTTPException(status_code=422, detail=f"ticks cannot exceed {settings.max_ticks}")


# API endpoints
@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Sketchbook API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/patterns", response_model=List[PatternSpec])
def get_patterns():
    """All registered patterns with their knobs."""
    return [get_pattern(name) for name in list_patterns()]


@app.get("/patterns/{name}", response_model=PatternSpec)
def get_pattern_by_name(name: str):
    """One pattern's knobs and defaults."""
    try:
        return get_pattern(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Pattern '{name}' not found")


@app.post("/rooms", response_model=RoomResponse)
def generate_rooms(request: RoomRequest):
    """Partition an n x n grid into rooms."""
    if request.n > settings.max_grid_size:
        raise HTTPException(status_code=422, detail=f"n cannot exceed {settings.max_grid_size}")
    try:
        config = RoomConfig(n=request.n, unity=request.unity, quads_only=request.quads_only)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    generator = RoomGenerator(config, prng=_prng(request.seed))
    rooms = []
    for room in generator.rooms:
        bounds = room.get_bounds()
        rooms.append(RoomModel(cells=[tuple(cell) for cell in room.cells], **bounds._asdict()))

    logger.info("Rooms generated", n=request.n, unity=request.unity, rooms=len(rooms))
    return RoomResponse(
        n=request.n,
        merge_attempts=generator.merge_attempts,
        merges=generator.merges,
        rooms=rooms,
    )


@app.post("/trees", response_model=TreeResponse)
def grow_tree(request: TreeRequest):
    """Seed a tree and run the requested number of growth ticks."""
    _check_ticks(request.ticks)
    if request.num_leaves > settings.max_leaves:
        raise HTTPException(status_code=422, detail=f"num_leaves cannot exceed {settings.max_leaves}")
    try:
        config = TreeConfig(
            origin=(request.origin.x, request.origin.y),
            num_leaves=request.num_leaves,
            branch_length=request.branch_length,
            min_dist=request.min_dist,
            wat=request.wat,
            leaf_mode=request.leaf_mode,
            shape_width=request.shape_width,
            width=request.width,
            height=request.height,
            center_origin=request.center_origin,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    tree = Tree(config, prng=_prng(request.seed))
    for _ in range(request.ticks):
        tree.grow()

    info = tree.display_info()
    logger.info(
        "Tree grown",
        ticks=request.ticks,
        branches=tree.branch_count,
        leaves_left=tree.leaf_count,
    )
    return TreeResponse(
        branches=[(PointModel.from_point(a), PointModel.from_point(b)) for a, b in info["branches"]],
        leaves=[PointModel.from_point(p) for p in info["leaves"]],
    )


@app.post("/venation", response_model=VenationResponse)
def fill_venation(request: VenationRequest):
    """Fill a polar border with venation."""
    _check_ticks(request.ticks)
    try:
        venation = Venation(
            request.branch_resolution,
            request.branch_length,
            Point(request.origin.x, request.origin.y),
            variance=request.variance,
            prng=_prng(request.seed),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    for _ in range(request.ticks):
        venation.fill_by_one(request.border)

    logger.info("Venation filled", ticks=request.ticks, branches=len(venation.branches))
    return VenationResponse(
        branches=[
            [PointModel.from_point(p) for p in points]
            for points in venation.cartesian_branches()
        ]
    )


@app.post("/geometry/intersection", response_model=IntersectionResponse)
def intersect(request: IntersectionRequest):
    """Intersection of two segments, null when they do not meet."""
    line_a = tuple(Point(p.x, p.y) for p in request.line_a)
    line_b = tuple(Point(p.x, p.y) for p in request.line_b)
    point = get_intersection_point(line_a, line_b)
    return IntersectionResponse(point=PointModel.from_point(point) if point is not None else None)


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
