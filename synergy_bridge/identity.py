"""Server identity and the official architecture diagram."""

from typing import Any, Dict, List

SERVER_NAME = "SynergyBridge MCP"
SERVER_VERSION = "9.0.0.1-SP3-HF42-FINAL-FINAL2-REALLYFINAL"
VENDOR = "SynergyBridge Enterprise Solutions Division"
TAGLINE = "Bridging the gap between your legacy investments and tomorrow's legacy investments"
SUPPORT = "Please open a Remedy ticket (average response time: 3-5 business days)"
DOCUMENTATION = "Available on SharePoint (2007). Ask Brenda for the password."
CERTIFICATIONS: List[str] = ["ISO 9001", "CMMI Level 3", "Y2K Compliant", "GDPR Pending Review"]
UPTIME = "99.9% (excluding maintenance windows, which occur daily from 6 AM to 11 PM)"
CODENAME = "Project ENTERPRISE-THUNDER"
STATUS = "OPERATIONAL (within acceptable parameters)"

ARCHITECTURE_DIAGRAM = """\
╔══════════════════════════════════════════════════════════════════════╗
║             SynergyBridge Enterprise Architecture (v9.0)             ║
╠══════════════════════════════════════════════════════════════════════╣
║                                                                      ║
║   ┌──────────┐     ┌──────────┐     ┌──────────┐     ┌──────────┐    ║
║   │  Agent   │     │   CLI    │     │  Other   │     │  Legacy  │    ║
║   │  Client  │     │  Client  │     │  Client  │     │ Terminal │    ║
║   └────┬─────┘     └────┬─────┘     └────┬─────┘     └────┬─────┘    ║
║        │                │                │                │          ║
║        └────────────────┴───────┬────────┴────────────────┘          ║
║                                 │                                    ║
║                         ┌───────▼───────┐                            ║
║                         │   Dispatcher  │                            ║
║                         └───────┬───────┘                            ║
║                                 │                                    ║
║   ┌─────────────────────────────▼────────────────────────────────┐   ║
║   │                  SynergyBridge Server (Python)               │   ║
║   │  ┌────────────────────────────────────────────────────────┐  │   ║
║   │  │                  12 Enterprise Tools                   │  │   ║
║   │  │   WebSphere │ COBOL │ JCL │ SOA │ ESB │ LDAP │ ...     │  │   ║
║   │  └────────────────────────────────────────────────────────┘  │   ║
║   │  ┌─────────────────┐  ┌────────────────┐  ┌──────────────┐   │   ║
║   │  │   Enterprise    │  │     Canned     │  │    Error     │   │   ║
║   │  │  Delay Engine   │  │   Responses    │  │  Injection   │   │   ║
║   │  └─────────────────┘  └────────────────┘  └──────────────┘   │   ║
║   └──────────────────────────────────────────────────────────────┘   ║
║                                 │                                    ║
║        ┌────────────────────────┼──────────────────────────┐         ║
║        │                        │                          │         ║
║   ┌────▼─────┐          ┌───────▼───────┐          ┌───────▼─────┐   ║
║   │WebSphere │          │   Mainframe   │          │  Corporate  │   ║
║   │ Cluster  │          │  (Simulated)  │          │    LDAP     │   ║
║   │ (v8.5.5) │          │   z/OS 2.4    │          │   (Active   │   ║
║   └──────────┘          └───────────────┘          │  Directory) │   ║
║                                                    └─────────────┘   ║
║                                                                      ║
║   Note: All backend systems are simulated with enterprise-grade      ║
║   fidelity. No actual mainframes were harmed in this deployment.     ║
╚══════════════════════════════════════════════════════════════════════╝
"""


def server_info() -> Dict[str, Any]:
    """Server metadata, as reported to clients and operators."""
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "vendor": VENDOR,
        "tagline": TAGLINE,
        "status": STATUS,
        "support": SUPPORT,
        "documentation": DOCUMENTATION,
        "certifications": list(CERTIFICATIONS),
        "uptime": UPTIME,
        "codename": CODENAME,
    }
