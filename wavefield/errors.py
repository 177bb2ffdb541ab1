class WavefieldError(Exception):
    def __init__(self, message):
        super().__init__(message)

class SceneError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)

class SizingError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)

class BoundsError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)

class DeviceError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)

class BuildError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)

class DispatchError(WavefieldError):
    def __init__(self, message):
        super().__init__(message)
