from .barcode import Barcode, checksum_digit
from .consensus import CandidateTable, candidate_codes, detect_valid_barcode, resolve
from .decoder import decode, recognize_number, recognize_system_code
from .device import ArrayDevice, Device, ImageDevice
from .recognizer import recognize
from .signal import Field, binarize, extract_fields
