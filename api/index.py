from contextlib import asynccontextmanager
import logging
import os
from pathlib import Path
import sys

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mamma_me.core import request_advisory  # noqa: E402
from mamma_me.dataset.repository import DatasetConfig, DatasetStore  # noqa: E402
from mamma_me.exceptions import DatasetLoadError, DatasetNotReadyError  # noqa: E402
from mamma_me.schema import FoodSummary  # noqa: E402
from mamma_me.search.engine import SearchConfig, SearchEngine  # noqa: E402
from mamma_me.search.text import normalize  # noqa: E402
from mamma_me.search_log import DebouncedSearchLog, SearchLogger, SearchLoggingConfig  # noqa: E402
from mamma_me.summary import build_reliability_summary  # noqa: E402

logger = logging.getLogger(__name__)

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
MAX_QUERY_LENGTH = int(os.getenv("MAX_QUERY_LENGTH", "200"))

STORE = DatasetStore(DatasetConfig.from_env())
ENGINE = SearchEngine(STORE, SearchConfig.from_env())
SEARCH_LOG = DebouncedSearchLog(SearchLogger(SearchLoggingConfig.from_env()))


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        await STORE.load()
    except DatasetLoadError:
        # STORE keeps status "error"; /search reports it as 503.
        pass
    yield
    await SEARCH_LOG.flush()


app = FastAPI(title="mamma-me API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SourceEntryResponse(BaseModel):
    sourceName: str
    verdict: str
    reliability: float
    note: str | None = None
    url: str | None = None


class FoodResponse(BaseModel):
    name: str
    weightedScore: float
    scoreRounded: int
    summary: str
    entries: list[SourceEntryResponse] = Field(default_factory=list)


class SearchResponse(BaseModel):
    query: str
    total: int
    strongMatch: bool
    showAdvisory: bool
    hints: list[str] = Field(default_factory=list)
    results: list[FoodResponse] = Field(default_factory=list)


class AdvisoryRequest(BaseModel):
    query: str


class AdvisoryResponse(BaseModel):
    ok: bool
    text: str


def _food_response(summary: FoodSummary) -> FoodResponse:
    return FoodResponse(
        name=summary.name,
        weightedScore=summary.weighted_score,
        scoreRounded=summary.score_rounded,
        summary=build_reliability_summary(summary.entries),
        entries=[
            SourceEntryResponse(
                sourceName=entry.source_name,
                verdict=entry.verdict.value,
                reliability=entry.reliability,
                note=entry.note,
                url=entry.url,
            )
            for entry in summary.entries
        ],
    )


def _raise_unavailable(exc: Exception) -> None:
    if isinstance(exc, DatasetNotReadyError):
        raise HTTPException(status_code=503, detail="loading") from exc
    raise HTTPException(status_code=503, detail=f"dataset_error: {exc}") from exc


@app.get("/health")
def health() -> dict[str, object]:
    return {"ok": True, "dataset": STORE.status}


@app.get("/search", response_model=SearchResponse)
async def search_foods(response: Response, q: str = Query(default="")) -> SearchResponse:
    if len(q) > MAX_QUERY_LENGTH:
        raise HTTPException(status_code=400, detail="query too long")
    try:
        result = ENGINE.search(q)
    except (DatasetNotReadyError, DatasetLoadError) as exc:
        _raise_unavailable(exc)

    SEARCH_LOG.submit(q, result_count=len(result.results), strong_match=result.strong_match)
    response.headers["Cache-Control"] = "public, max-age=60"
    return SearchResponse(
        query=q,
        total=len(result.results),
        strongMatch=result.strong_match,
        showAdvisory=result.show_advisory,
        hints=result.hints,
        results=[_food_response(summary) for summary in result.results],
    )


@app.get("/foods/{name}", response_model=FoodResponse)
def food_detail(name: str) -> FoodResponse:
    try:
        dataset = STORE.get()
    except (DatasetNotReadyError, DatasetLoadError) as exc:
        _raise_unavailable(exc)

    wanted = normalize(name)
    for summary in dataset.summaries:
        if normalize(summary.name) == wanted:
            return _food_response(summary)
    raise HTTPException(status_code=404, detail=f"food not found: {name}")


@app.post("/advisory", response_model=AdvisoryResponse)
def advisory(body: AdvisoryRequest) -> AdvisoryResponse:
    if not body.query.strip():
        raise HTTPException(status_code=400, detail="query is required")
    result = request_advisory(body.query)
    if not result.ok:
        logger.info("advisory failed for %r: %s", body.query, result.text)
    return AdvisoryResponse(ok=result.ok, text=result.text)
