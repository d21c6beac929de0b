"""Application-level errors raised by use cases."""


class OptimizationError(RuntimeError):
    """An optimization run failed; nothing from the run should be committed."""


class WorkOrderNotFoundError(LookupError):
    def __init__(self, work_order_id: int):
        super().__init__(f"Work order {work_order_id} not found")
        self.work_order_id = work_order_id


class WorkOrderNotAssignableError(ValueError):
    def __init__(self, work_order_id: int, reason: str):
        super().__init__(f"Work order {work_order_id} cannot be assigned: {reason}")
        self.work_order_id = work_order_id
