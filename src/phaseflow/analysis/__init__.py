# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Static per-frame analysis: direction field sampling and nullclines."""

from .nullclines import Nullcline, extract_nullcline, extract_nullclines
from .vector_field import (
    ARROW_HEAD_LENGTH,
    BASE_SCALE_FACTOR,
    FieldSample,
    arrow_from_sample,
    field_arrows,
    grid_points,
    sample_field,
)

__all__ = [
    "FieldSample",
    "grid_points",
    "sample_field",
    "arrow_from_sample",
    "field_arrows",
    "BASE_SCALE_FACTOR",
    "ARROW_HEAD_LENGTH",
    "Nullcline",
    "extract_nullcline",
    "extract_nullclines",
]
