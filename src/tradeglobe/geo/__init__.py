# SPDX-License-Identifier: Apache-2.0
from .countries import (
    CountryFeature,
    CountrySet,
    DataFormatError,
    centroid,
    load_countries,
)

__all__ = [
    "CountryFeature",
    "CountrySet",
    "DataFormatError",
    "centroid",
    "load_countries",
]
