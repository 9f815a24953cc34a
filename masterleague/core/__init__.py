"""Core bookkeeping rules for the MasterLeague betting admin.

This package contains pure building blocks with no web or storage imports:

- ``errors``       : the error taxonomy raised by catalog, ledger and settlement
- ``league_config``: stake bounds and runtime settings
- ``records``      : ``Game`` and ``Bet`` data-transfer objects
- ``payout``       : odd resolution, possible-win and stake parsing
- ``validation``   : bet placement and game creation rules
- ``settlement``   : the ``Pendente`` → ``Ganhou`` / ``Perdeu`` state machine

Nothing in this package imports from ``masterleague.services`` or
``masterleague.models``.
"""
