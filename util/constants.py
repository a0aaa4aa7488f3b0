class InternalURIs:
    API = "/api"
    VIDEO = API + "/video"
    VIDEO_TICK = VIDEO + "/tick"
    HEALTHZ = "/healthz"
