from .gateway import ApiGateway, ApiError, TransportError, AuthError, DecodeError

__all__ = ['ApiGateway', 'ApiError', 'TransportError', 'AuthError', 'DecodeError']
