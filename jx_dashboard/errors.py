"""
Error hierarchy for jx-dashboard

Every fatal condition of the dashboard command maps onto one of these types.
The CLI catches DashboardError and turns it into a non-zero exit code.
"""


class DashboardError(Exception):
    """Base exception for dashboard launcher errors"""
    pass


class ClientInitError(DashboardError):
    """Raised when the cluster client or namespace cannot be obtained"""
    pass


class ServiceNotFoundError(DashboardError):
    """Raised when the dashboard service URL cannot be resolved"""
    pass


class SecretFetchError(DashboardError):
    """Raised when the basic auth Secret cannot be read (other than not found)"""
    pass


class URLParseError(DashboardError):
    """Raised when the dashboard URL is malformed"""
    pass


class BrowserOpenError(DashboardError):
    """Raised when no browser could be launched for the URL"""
    pass
