import sys

from catchup_sync.main import main


if __name__ == "__main__":
    sys.exit(main())
