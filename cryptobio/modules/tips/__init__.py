from cryptobio.modules.tips.flow import PendingSignal, TipFlow, TipStatus

__all__ = ["TipFlow", "TipStatus", "PendingSignal"]
