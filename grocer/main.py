import logging

import uvicorn
from grocer.api.api_run import app
from grocer.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL, AppSettings


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = AppSettings.from_env()
    logger = logging.getLogger("grocer_app")
    logger.info("Recipes and shopping list under %s", settings.base_path)
    logger.info("Aisle file: %s", settings.aisle_path or "none")
    logger.info("Pantry file: %s", settings.pantry_path or "none")
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
