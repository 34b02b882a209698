from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.services.bitplane_lsb import __version__
from src.services.bitplane_lsb.main import router as lsb_router
from src.utility.constants_manager import ConstantsManager

constants = ConstantsManager()

# Configure logging
logging.basicConfig(level=constants.get_log_level())
logger = logging.getLogger(__name__)


app = FastAPI(title="Easy LSB", version=__version__)

# Ensure output directories exist
os.makedirs(constants.get_output_dir(), exist_ok=True)
os.makedirs(constants.get_bit_planes_dir(), exist_ok=True)

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.mount("/files", StaticFiles(directory=constants.get_output_dir()), name="stego")
app.mount("/visualizations", StaticFiles(directory=constants.get_bit_planes_dir()), name="visualizations")


# --- Stats Tracking ---
class SystemStats:
    def __init__(self):
        self.encoded_count = 0
        self.decoded_count = 0
        self.failed_count = 0

stats = SystemStats()


@app.middleware("http")
async def count_requests(request, call_next):
    response = await call_next(request)
    if request.url.path == "/lsb/encode":
        stats.encoded_count += 1
    elif request.url.path == "/lsb/decode":
        stats.decoded_count += 1
    if response.status_code >= 400:
        stats.failed_count += 1
    return response


@app.get("/stats")
async def get_stats():
    return {
        "encoded_count": stats.encoded_count,
        "decoded_count": stats.decoded_count,
        "failed_count": stats.failed_count,
    }


app.include_router(lsb_router)
logger.info("Easy LSB %s ready, writing stego images to %s", __version__, constants.get_output_dir())
