from datetime import datetime

from common.decimal_utils import ZERO
from reports.ageing import AGEING_BUCKETS
from transactions.transaction_service import with_display_status


class ReportService:
    def __init__(self, store):
        self.store = store

    def receivables_ageing(self, user_id, now=None):
        return self._ageing_report("receivables", self.store.get_receivables_ageing(user_id, now))

    def payables_ageing(self, user_id, now=None):
        return self._ageing_report("payables", self.store.get_payables_ageing(user_id, now))

    @staticmethod
    def _ageing_report(kind, buckets):
        return {
            "report": f"{kind}_ageing",
            "buckets": buckets,
            "total": sum((buckets[b] for b in AGEING_BUCKETS), ZERO),
        }

    def dashboard(self, user_id, recent_limit=5):
        """Headline numbers for the home screen."""
        return {
            "generated_date": datetime.utcnow(),
            "receivables": self.store.get_open_receivables(user_id),
            "payables": self.store.get_open_payables(user_id),
            "receivables_ageing": self.store.get_receivables_ageing(user_id),
            "payables_ageing": self.store.get_payables_ageing(user_id),
            "recent_transactions": [
                with_display_status(t) for t in self.store.get_recent_transactions(user_id, recent_limit)
            ],
            "last_tally_sync": self.store.get_recent_tally_sync_log(user_id),
        }
