"""Court Data Fetcher: simulated court case status lookup"""

__version__ = "0.1.0"
