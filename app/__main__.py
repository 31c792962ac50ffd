import uvicorn

from app.config import load_settings_or_exit


def main():
    settings = load_settings_or_exit()

    from app.main import app

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
