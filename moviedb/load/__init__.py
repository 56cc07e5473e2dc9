from moviedb.load.bulk_load import LoadResult, load, load_file
from moviedb.load.provision import provision

__all__ = ["LoadResult", "load", "load_file", "provision"]
