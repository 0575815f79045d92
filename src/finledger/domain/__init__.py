"""Domain layer for finledger application.

Services live in their own modules (``finledger.domain.ledger`` etc.) and
are not re-exported here.
"""
