# =======================================================================================
# app.py - Development Server Runner
# =======================================================================================
import uvicorn

from checkin.config import config

if __name__ == "__main__":
    uvicorn.run(
        "checkin.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_DEBUG,
        log_level=config.LOG_LEVEL.lower(),
    )
