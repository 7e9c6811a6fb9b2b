import uvicorn

from artshop.config import settings


def main():
    uvicorn.run("artshop.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    main()
