import uvicorn

from checkip.app import app
from checkip.config import HOST, PORT


def main():
    # uvicorn exits the process if the port can't be bound
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
