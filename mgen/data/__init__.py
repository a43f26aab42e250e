from .loader import DataValue, DataLoadError, DATA_FORMATS, load_data, load_data_file, data_format_for

__all__ = ["DataValue", "DataLoadError", "DATA_FORMATS", "load_data", "load_data_file", "data_format_for"]
