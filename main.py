import logging
import os

import uvicorn


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.getenv("PORT", "5000"))
    logging.getLogger(__name__).info("Server is running on port %s", port)
    uvicorn.run("app.main:app", host=os.getenv("HOST", "0.0.0.0"), port=port)
