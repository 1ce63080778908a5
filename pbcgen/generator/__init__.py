"""pbcgen code generator."""

from .c import render as render
from .c import render_header as render_header
from .c import render_source as render_source
from .escape import cescape as cescape
from .fields import make_field_generator as make_field_generator
from .naming import *
from .printer import Printer as Printer
from .ranges import compress_ranges as compress_ranges
from .ranges import write_int_ranges as write_int_ranges
from .schema import ValidationError as ValidationError
from .schema import load_schema as load_schema
from .types import *
