from eden.output_adapters.exceptions import OutputWriterError, UnsafeOutputPathError
from eden.output_adapters.writer import OutputFile, OutputWriter, clean_output, write_output

__all__ = [
    "OutputFile",
    "OutputWriter",
    "OutputWriterError",
    "UnsafeOutputPathError",
    "clean_output",
    "write_output",
]
