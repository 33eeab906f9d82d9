# pyright: reportUnusedImport=false
from assoc.callbacks import Fit
from assoc.container import AssociativeContainer, Key
from assoc.cursor import Cursor
from assoc.errors import ContainerError, ConversionError, InvalidInputError
from assoc.sources import Arrayable, to_mapping
