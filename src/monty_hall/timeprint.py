#!/usr/bin/env python3

import datetime

from tqdm import tqdm


def timeprint(*args):
    timestamp = datetime.datetime.now().strftime("[%Y-%m-%d %H:%M:%S]")

    # tqdm.write keeps any active progress bar intact
    tqdm.write(" ".join(str(a) for a in (timestamp, *args)))
