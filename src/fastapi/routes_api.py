import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

# Load environment variables from .env file
load_dotenv()

from src.astar.exceptions import SearchBudgetExceededError, ValidationError
from src.route_planner.application import FindCheapestRoute
from src.route_planner.config import RouterSettings
from src.route_planner.exceptions import SameAirportError, UnknownAirportCodeError
from src.route_planner.ports.graph_repository import GraphNotInitializedError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Graph is built lazily, on startup or on the first request
router = FindCheapestRoute(settings=RouterSettings.from_env())


@asynccontextmanager
async def lifespan(app: FastAPI):
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, router.warm_up)
    except GraphNotInitializedError as e:
        # Keep serving /health; searches retry the cold start
        logger.warning("Route graph warm-up failed: %s", e)
    yield
    router.shutdown()


app = FastAPI(title="Layover Router API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# --- Pydantic Schemas (The JSON Contract) ---


class AirportSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)  # Allows reading from dataclasses

    id: int
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None
    latitude: float
    longitude: float


class RouteResponseSchema(BaseModel):
    source: str
    destination: str
    distance: int
    hops: List[str]


# --- API Endpoints ---


@app.get("/health")
async def health() -> str:
    return "OK"


@app.get("/airports/{code}", response_model=AirportSchema)
async def get_airport(code: str):
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, router.get_airport, code)
    except UnknownAirportCodeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GraphNotInitializedError as e:
        logger.error("Airport lookup failed: %s", e)
        raise HTTPException(status_code=500, detail="Route graph unavailable")


@app.get("/routes/{source}/{destination}", response_model=RouteResponseSchema)
async def find_route(source: str, destination: str):
    # The search is synchronous and CPU-bound
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, router.search, source, destination)
    except UnknownAirportCodeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SameAirportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchBudgetExceededError as e:
        logger.warning("Search %s -> %s aborted: %s", source, destination, e)
        raise HTTPException(status_code=503, detail="Search budget exceeded, try again later")
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Unexpected error searching %s -> %s", source, destination)
        raise HTTPException(status_code=500, detail="Internal server error")

    if result is None:
        raise HTTPException(
            status_code=404,
            detail=f"No route from {source.upper()} to {destination.upper()}",
        )

    # Echo the codes as requested; hops use display codes
    return RouteResponseSchema(
        source=source,
        destination=destination,
        distance=result.distance,
        hops=result.route_codes,
    )
