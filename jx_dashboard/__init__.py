"""
jx-dashboard: open the Jenkins X Pipelines Dashboard

Resolves the URL of the dashboard service in the cluster, adds the basic auth
login from its Secret and opens it in the default browser.
"""

__version__ = "1.0.0"
__description__ = "Open the Jenkins X Pipelines Dashboard"
