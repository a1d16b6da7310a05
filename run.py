import uvicorn
from app.core.config import settings
from app.utils.helpers import logger

if __name__ == "__main__":
    logger.info(f"[BOOT] PORT env = {settings.SERVER_PORT}")
    logger.info(f"[BOOT] API listening on http://{settings.SERVER_HOST}:{settings.SERVER_PORT}")

    uvicorn.run(
        "app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
