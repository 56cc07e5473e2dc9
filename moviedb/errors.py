class MovieDBError(Exception):
    """Base class for errors raised by moviedb."""


class UnknownTableError(MovieDBError):
    def __init__(self, table_name):
        super().__init__(f"Unrecognized table: {table_name!r}")
        self.table_name = table_name


class SchemaProvisioningError(MovieDBError):
    def __init__(self, table_name, cause):
        super().__init__(f"Could not create table {table_name}: {cause}")
        self.table_name = table_name
        self.cause = cause


class LoadError(MovieDBError):
    """A single record could not be loaded; the rest of its table is skipped."""

    def __init__(self, table_name, index, values, reason):
        super().__init__(f"{table_name} record {index}: {reason} {values}")
        self.table_name = table_name
        self.index = index
        self.values = values
        self.reason = reason


class RecordShapeError(LoadError):
    pass


class RecordInsertError(LoadError):
    pass


class ReportError(MovieDBError):
    pass
