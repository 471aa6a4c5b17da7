import uvicorn

from ai_compare.config import settings


def run():
    uvicorn.run("ai_compare.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
