# strategies/__init__.py
r"""Order reduction strategies for a rolling history of snapshots.

.. currentmodule:: romsketch.strategies

Each strategy owns an :math:`n \times M` history of the most recent
snapshots and an :math:`n \times r` basis that approximates the range of the
history. The host solver advances the history by one snapshot per cycle and
calls :meth:`order_reduction`, which overwrites the basis in place.

**Classes**

.. autosummary::
    :toctree: _autosummaries

    StrategyTemplate
    RandomizedStrategyTemplate
    POD
    RandomizedQR
    RandomizedSVD
    Nystrom
    SketchState

**Functions**

.. autosummary::
    :toctree: _autosummaries

    order_reduction
    sketch_update
"""

from ._base import *
from ._sketch import *
from ._randomized import *
from ._pod import *
from ._rqr import *
from ._rsvd import *
from ._nystrom import *
