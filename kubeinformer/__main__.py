"""Entry point for `python -m kubeinformer`.

Usage:
    KUBEINFORMER_HANDLERS=myapp.handlers:PodHandler python -m kubeinformer
"""

from __future__ import annotations

import asyncio

from kubeinformer.app import main

asyncio.run(main())
