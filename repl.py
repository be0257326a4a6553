from calcparser import config
from calcparser.logging_config import setup_logging
from calcparser.runtime import Session
from calcparser.utils import format_number


if __name__ == "__main__":
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    session = Session()

    while True:
        try:
            code = input("? ").strip()
        except EOFError:
            break
        if not code:
            break

        result = session.evaluate_result(code)
        print(f"{code} = {format_number(result.value)}")
        if result.exception is not None:
            print(result.exception)
