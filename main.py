import uvicorn

from vidafit.core.config import get_settings
from vidafit.main import app

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="debug" if settings.DEBUG_MODE else "info")
