# SPDX-License-Identifier: Apache-2.0
from tradeglobe.cli import main

raise SystemExit(main())
