from .pivot import pivot, ABSENT, ROW_KEY_COLUMN
from .matrix_reader import MatrixReader

__all__ = ['pivot', 'ABSENT', 'ROW_KEY_COLUMN', 'MatrixReader']
