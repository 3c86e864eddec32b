# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/


def print_banner(what: str):
    print(f"""
This will step you through {what}.
1. You will be prompted before each step
2. You will be shown the commands that will be run
3. STDOUT and STDERR will be printed to your console, as if you'd run the commands manually.
""")
