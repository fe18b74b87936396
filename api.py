import asyncio
import uvicorn
from config import ApplicationConfig
from src.api.app import create_app
from src.depends import create_tables

app = create_app(ApplicationConfig)

if __name__ == "__main__":
    if ApplicationConfig.CREATE_TABLES:
        asyncio.run(create_tables())

    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.API_RELOAD,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
