"""Usage domain — billing calendar, ledger, quota enforcement and usage reads.

Use Inject(QuotaEnforcerProtocol) in FastAPI endpoints for the singleton enforcer.
Use Inject(UsageQueryServiceProtocol) for read-side snapshots.
"""
