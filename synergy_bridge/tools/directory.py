"""Corporate directory synchronization over LDAP."""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.options import integer, parse_option, text

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 1000


class SyncScope(Enum):
    SUBTREE = "SUBTREE"
    ONE_LEVEL = "ONE_LEVEL"
    BASE_ONLY = "BASE_ONLY"


class ConflictResolution(Enum):
    AD_WINS = "AD_WINS"
    LDAP_WINS = "LDAP_WINS"
    OLDEST_WINS = "OLDEST_WINS"
    NEWEST_WINS = "NEWEST_WINS"
    RANDOM = "RANDOM"
    MANAGER_DECIDES = "MANAGER_DECIDES"


class ReferralHandling(Enum):
    FOLLOW = "FOLLOW"
    IGNORE = "IGNORE"
    THROW_EXCEPTION = "THROW_EXCEPTION"
    FOLLOW_INFINITELY = "FOLLOW_INFINITELY"


class LdapSyncTool(EnterpriseTool):
    """Sync the corporate directory with the Active Directory forest.

    Every run skips the same 47,000 contractor records.
    """

    name = "ldap-corporate-directory-sync"
    description = (
        "Synchronize corporate directory with Active Directory forest via LDAP "
        "with advanced conflict resolution strategies."
    )
    required = ("baseDn",)
    required_hints = {
        "baseDn": "Please specify the base DN (e.g., ou=Users,dc=megacorp,dc=com).",
    }
    integer_params = ("pageSize",)
    parameters = {
        "baseDn": "Base DN (e.g., ou=Users,dc=megacorp,dc=com)",
        "syncScope": "SUBTREE, ONE_LEVEL or BASE_ONLY",
        "conflictResolution": (
            "AD_WINS, LDAP_WINS, OLDEST_WINS, NEWEST_WINS, RANDOM or MANAGER_DECIDES"
        ),
        "attributeMapping": "Attribute mapping configuration as JSON",
        "filterExpression": "RFC 2254 LDAP filter expression",
        "pageSize": "Paged results size (1-1000)",
        "referralHandling": "FOLLOW, IGNORE, THROW_EXCEPTION or FOLLOW_INFINITELY",
    }
    interrupted_message = (
        "Directory sync interrupted. LDAP connection pool may be corrupted. "
        "Please restart the Identity Management service and sacrifice a small goat."
    )

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        page_size = integer(params, "pageSize")
        if page_size is not None and not MIN_PAGE_SIZE <= page_size <= MAX_PAGE_SIZE:
            return (
                f"ERROR: pageSize must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}. "
                f"Current value: {page_size}. For larger page sizes, please submit a "
                "capacity planning request and wait 6-8 weeks."
            )
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "base_dn": text(params, "baseDn"),
            "scope": parse_option(SyncScope, params.get("syncScope"), SyncScope.SUBTREE),
            "conflict": parse_option(
                ConflictResolution,
                params.get("conflictResolution"),
                ConflictResolution.MANAGER_DECIDES,
            ),
            "referral": parse_option(
                ReferralHandling, params.get("referralHandling"), ReferralHandling.IGNORE
            ),
            "filter_expression": text(params, "filterExpression"),
            "page_size": integer(params, "pageSize"),
            "attribute_mapping": text(params, "attributeMapping"),
        }
