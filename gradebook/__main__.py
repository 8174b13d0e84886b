import uvicorn

from gradebook.core.config import CONFIG


def main():
    uvicorn.run("gradebook.main:app", host=CONFIG.HOST, port=CONFIG.PORT)


if __name__ == "__main__":
    main()
