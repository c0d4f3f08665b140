"""
Core numeric kernel: precision context, number systems, π and converter ordering.

This module contains the building blocks that are independent of quantity
formatting and of the unit/converter object model.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
