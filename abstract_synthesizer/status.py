class ExitCodes:
    SUCCESS = 0
    ERROR = 1
    # 2 is taken by click for usage errors
    CONFIG_ERROR = 3
