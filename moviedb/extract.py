import csv
import logging


def read_records(path, encoding="utf-8"):
    """Reads a CSV extract into a list of records (lists of strings).

    The header is returned as the first record. Quoted fields are unquoted,
    each record keeps exactly the fields it has on disk, and blank lines are
    skipped. Nothing is converted; the loader decides what the strings mean.

    A quote that closes a quoted field early does not end the field: the
    rest of the field is kept, quote characters included, so
    ``"Bob "Junior" Smith"`` reads as ``Bob Junior" Smith"``.
    """
    logging.info(f"Extracting records from {path} ...")
    with open(path, "r", encoding=encoding, errors="replace", newline="") as infile:
        records = [record for record in csv.reader(infile) if record]
    logging.info(f"Read {len(records):,} records from {path}")
    return records
