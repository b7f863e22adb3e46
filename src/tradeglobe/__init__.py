# SPDX-License-Identifier: Apache-2.0
"""Interactive 3D globe of a country's merchandise exports.

Subpackages:
- ``tradeglobe.geo``: country boundaries, centroids and spherical helpers
- ``tradeglobe.transform``: trade records, name aliases and aggregation
- ``tradeglobe.visualization``: projection, camera, scene, flow layout,
  interaction routing and drawing surfaces
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
