"""
Caller-facing message catalogue keyed by operation.
Portuguese (pt_BR) is the default locale; English is provided as an alternative.
"""

from typing import Dict, Optional
from listing_service.config import get_settings

DEFAULT_LOCALE = "pt_BR"

MESSAGES: Dict[str, Dict[str, str]] = {
    "pt_BR": {
        # Properties
        "property.list": "Falha ao listar os imóveis!",
        "property.list.coordinates": "Latitude e longitude inválidas!",
        "property.create": "Falha ao cadastrar o imóvel!",
        "property.show": "Falha ao exibir o imóvel!",
        "property.update": "Falha ao atualizar o imóvel!",
        "property.delete": "Falha ao excluir o imóvel!",
        "property.delete.unauthorized": "Não autorizado",
        "property.deleted": "Imóvel excluído",
        # Users
        "user.list": "Falha ao listar os usuários!",
        "user.create": "Falha ao registrar o usuário!",
        "user.create.duplicate": "Usuário já cadastrado",
        "user.show": "Falha ao listar o usuário!",
        "user.update": "Falha ao alterar o usuário",
        "user.update.duplicate": "E-mail já cadastrado",
        "user.delete": "Falha ao excluir o usuário",
        "user.deleted": "Usuário excluído",
    },
    "en": {
        "property.list": "Failed to list properties!",
        "property.list.coordinates": "Invalid latitude and longitude!",
        "property.create": "Failed to create property!",
        "property.show": "Failed to show property!",
        "property.update": "Failed to update property!",
        "property.delete": "Failed to delete property!",
        "property.delete.unauthorized": "Not authorized",
        "property.deleted": "Property deleted",
        "user.list": "Failed to list users!",
        "user.create": "Failed to register user!",
        "user.create.duplicate": "User already registered",
        "user.show": "Failed to show user!",
        "user.update": "Failed to update user",
        "user.update.duplicate": "Email already registered",
        "user.delete": "Failed to delete user",
        "user.deleted": "User deleted",
    },
}


def get_message(key: str, locale: Optional[str] = None) -> str:
    """
    Look up the message for an operation key.

    Args:
        key: Operation key, e.g. "property.show"
        locale: Locale name; defaults to the configured locale

    Returns:
        Localized message. Unknown locales fall back to pt_BR.

    Raises:
        KeyError: If the key is not in the catalogue
    """
    locale = locale or get_settings().locale
    catalogue = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    if key in catalogue:
        return catalogue[key]
    return MESSAGES[DEFAULT_LOCALE][key]
