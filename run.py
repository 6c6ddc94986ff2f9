from csrfguard.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("csrfguard.main:app", host=settings.host, port=settings.port, reload=True)
