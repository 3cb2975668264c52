from app.schemas.subscription import RequestorTargetRequest


class BlockRequest(RequestorTargetRequest):
    pass
