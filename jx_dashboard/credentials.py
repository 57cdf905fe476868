"""
Basic auth credentials stored in a cluster Secret
"""

from typing import Dict

from .collectors.base import CollectorError, KubectlClient, ResourceNotFoundError
from .errors import SecretFetchError
from .models import Credential
from .parsers.base import ParserError, parse_secret_data


async def fetch_secret_data(client: KubectlClient, name: str) -> Dict[str, bytes]:
    """Read Secret `name` from the client's namespace as key to bytes

    Raises:
        ResourceNotFoundError: When the Secret does not exist
        SecretFetchError: For any other failure
    """
    try:
        data = await client.get_json("secret", name)
        return parse_secret_data(data)
    except ResourceNotFoundError:
        raise
    except (CollectorError, ParserError) as e:
        raise SecretFetchError(
            f"failed to load Secret {name} in namespace {client.namespace}: {e}"
        ) from e


def credential_from_secret(data: Dict[str, bytes]) -> Credential:
    """Build the login from the Secret's username and password keys"""
    return Credential(username=data.get("username"), password=data.get("password"))
