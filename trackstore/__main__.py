import uvicorn

from trackstore.config import HOST, PORT


def main() -> None:
    uvicorn.run("trackstore.api.fastapi_app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
