from fastapi import FastAPI
import logging

from cash_terminal.api.routes import router

app = FastAPI(title="cash-terminal", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "cash-terminal", "version": "0.1.0"}
