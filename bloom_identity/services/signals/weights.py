from pydantic import BaseModel

from bloom_identity.models.profile import SignalWeights


class WeightSchedule(BaseModel):
    """
    Dynamic weight schedule for signal fusion.

    Feedback weight grows with observed events but is capped, the declared profile
    loses weight as feedback gains it, and conversation absorbs the remainder:

        feedback     = min(feedback_cap, event_count * feedback_per_event)
        static       = max(static_floor, static_base - feedback * static_decay)  (0 without a profile)
        conversation = 1.0 - static - feedback
    """

    feedback_per_event: float = 0.02
    feedback_cap: float = 0.3
    static_base: float = 0.3
    static_floor: float = 0.2
    static_decay: float = 0.33

    def feedback_weight(self, event_count: int) -> float:
        return min(self.feedback_cap, max(0, event_count) * self.feedback_per_event)

    def static_weight(self, feedback_weight: float, has_static_profile: bool) -> float:
        if not has_static_profile:
            return 0.0
        return max(self.static_floor, self.static_base - feedback_weight * self.static_decay)

    def compute(self, event_count: int, has_static_profile: bool) -> SignalWeights:
        feedback = self.feedback_weight(event_count)
        static = self.static_weight(feedback, has_static_profile)
        return SignalWeights(conversation=1.0 - static - feedback, static=static, feedback=feedback)


DEFAULT_WEIGHT_SCHEDULE = WeightSchedule()
