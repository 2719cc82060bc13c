import logging

from akinator.config import Config


def main():
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    problems = Config.validate()
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        raise SystemExit(1)

    import uvicorn
    uvicorn.run("akinator.main:app", host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL.lower())

if __name__ == "__main__":
    main()
