from linecat import *


# Program name shown in usage lines and fault headers.
__prog__ = "cat"


if __name__ == '__main__':
    main()
