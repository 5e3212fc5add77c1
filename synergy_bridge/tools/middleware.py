"""Messaging middleware: the service bus, Rendezvous and Tuxedo."""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.options import flag, integer, number, parse_option, text

VALID_TP_FLAGS = ("TPNOTRAN", "TPNOBLOCK", "TPNOTIME", "TPSIGRSTRT", "TPNOREPLY")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_MAX_BACKOFF_SECONDS = 60


class CorrelationIdStrategy(Enum):
    GENERATE = "GENERATE"
    PROPAGATE = "PROPAGATE"
    PRAY_IT_EXISTS = "PRAY_IT_EXISTS"


class FieldEncoding(Enum):
    NATIVE = "NATIVE"
    PORTABLE = "PORTABLE"
    RV_MSG = "RV_MSG"


class BufferType(Enum):
    STRING = "STRING"
    CARRAY = "CARRAY"
    FML = "FML"
    FML32 = "FML32"
    VIEW = "VIEW"
    VIEW32 = "VIEW32"
    XML = "XML"


class EsbRouteTool(EnterpriseTool):
    """Configure a route on the enterprise service bus."""

    name = "enterprise-service-bus-route"
    description = (
        "Configure message routing on the Enterprise Service Bus with XSLT "
        "transformation, content-based routing and guaranteed-ish delivery."
    )
    required = ("sourceQueue", "destinationTopic")
    required_hints = {
        "sourceQueue": "Please specify the source JMS queue name.",
        "destinationTopic": "Please specify the destination JMS topic.",
    }
    integer_params = ("maxRetries", "maxBackoffSeconds")
    number_params = ("backoffMultiplier",)
    parameters = {
        "sourceQueue": "Source JMS queue name",
        "destinationTopic": "Destination JMS topic",
        "transformationXslt": "XSLT transformation stylesheet",
        "contentBasedRoutingExpression": "XPath 1.0 content-based routing expression",
        "messageEnrichmentEndpoint": "Message enrichment service URL",
        "deadLetterQueueName": "Dead letter queue name for failed messages",
        "maxRetries": "Maximum retry attempts",
        "backoffMultiplier": "Exponential backoff multiplier",
        "maxBackoffSeconds": "Maximum backoff duration in seconds",
        "correlationIdStrategy": "GENERATE, PROPAGATE or PRAY_IT_EXISTS",
    }
    interrupted_message = (
        "Route configuration interrupted. The ESB may be in an inconsistent state. "
        "Please restart all ESB nodes and contact the middleware team "
        "(average response time: 2-3 weeks)."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        retries = integer(params, "maxRetries")
        multiplier = number(params, "backoffMultiplier")
        max_backoff = integer(params, "maxBackoffSeconds")
        return {
            "source_queue": text(params, "sourceQueue"),
            "destination_topic": text(params, "destinationTopic"),
            "correlation": parse_option(
                CorrelationIdStrategy,
                params.get("correlationIdStrategy"),
                CorrelationIdStrategy.PRAY_IT_EXISTS,
            ),
            "xslt": text(params, "transformationXslt"),
            "routing_expression": text(params, "contentBasedRoutingExpression"),
            "enrichment_endpoint": text(params, "messageEnrichmentEndpoint"),
            "dead_letter_queue": text(params, "deadLetterQueueName"),
            "show_retry_policy": any(
                value is not None for value in (retries, multiplier, max_backoff)
            ),
            "max_retries": DEFAULT_MAX_RETRIES if retries is None else retries,
            "backoff_multiplier": (
                DEFAULT_BACKOFF_MULTIPLIER if multiplier is None else multiplier
            ),
            "max_backoff": DEFAULT_MAX_BACKOFF_SECONDS if max_backoff is None else max_backoff,
        }


class TibcoPublishTool(EnterpriseTool):
    """Publish to a Rendezvous subject nobody is listening on."""

    name = "tibco-rendezvous-publish"
    description = (
        "Publish a message to TIBCO Rendezvous with optional certified delivery. "
        "Subscribers are on vacation."
    )
    required = ("subject", "messagePayload")
    required_hints = {
        "subject": "Please specify the RV subject (e.g., CORP.TRADE.EQUITY.>).",
        "messagePayload": "What would you like to send to the void?",
    }
    integer_params = ("timeToLive",)
    parameters = {
        "subject": "RV subject (e.g., CORP.TRADE.EQUITY.>)",
        "messagePayload": "Message payload content",
        "certifiedDelivery": "Enable certified messaging for guaranteed delivery",
        "timeToLive": "Time to live in seconds",
        "sendSubject": "Explicit send subject",
        "replySubject": "Reply subject for request/reply pattern",
        "fieldEncoding": "NATIVE, PORTABLE or RV_MSG",
    }
    interrupted_message = (
        "Message publication interrupted. Message may or may not have been sent. "
        "Please check the TIBCO logs, if you can find them."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        payload = text(params, "messagePayload") or ""
        return {
            "message_id": self.responses.generate_message_id(),
            "subject": text(params, "subject"),
            "payload_size": len(payload),
            "encoding": parse_option(
                FieldEncoding, params.get("fieldEncoding"), FieldEncoding.NATIVE
            ),
            "certified": flag(params, "certifiedDelivery"),
            "ttl": integer(params, "timeToLive"),
            "send_subject": text(params, "sendSubject"),
            "reply_subject": text(params, "replySubject"),
        }


def tp_flag_warnings(tp_flags: str) -> List[str]:
    """Warnings for a comma-separated list of Tuxedo flags.

    Unrecognized flags are warned about, never rejected.
    """
    warnings = []
    for raw in tp_flags.split(","):
        tp_flag = raw.strip().upper()
        if not tp_flag:
            continue
        if tp_flag == "TPNOTIME":
            warnings.append("TPNOTIME flag detected. Transaction may run indefinitely.")
        elif tp_flag == "TPNOREPLY":
            warnings.append("TPNOREPLY flag detected. No confirmation will be sent.")
        elif tp_flag not in VALID_TP_FLAGS:
            warnings.append(f"Unrecognized flag '{tp_flag}'. Proceeding anyway.")
    return warnings


class TuxedoTransactionTool(EnterpriseTool):
    """Begin a two-phase-commit transaction that may never resolve."""

    name = "tuxedo-transaction-begin"
    description = (
        "Begin a distributed transaction across Tuxedo application servers with "
        "two-phase commit coordination."
    )
    required = ("domainId", "serviceName")
    required_hints = {
        "domainId": "Please specify the Tuxedo domain identifier.",
        "serviceName": "Please specify the target service name.",
    }
    integer_params = ("transactionTimeout", "priorityClass", "compressionLevel")
    parameters = {
        "domainId": "Tuxedo domain identifier",
        "serviceName": "Target service name",
        "transactionTimeout": "Transaction timeout in seconds",
        "tpFlags": "Comma-separated TP flags: " + ", ".join(VALID_TP_FLAGS),
        "bufferType": "STRING, CARRAY, FML, FML32, VIEW, VIEW32 or XML",
        "priorityClass": "Priority class (1-100)",
        "compressionLevel": "Compression level (0-9)",
    }
    interrupted_message = (
        "Transaction initiation interrupted. Two-phase commit state unknown. "
        "Please contact the DBA team and prepare for manual recovery procedures."
    )

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        priority = integer(params, "priorityClass")
        if priority is not None and not 1 <= priority <= 100:
            return (
                f"ERROR: priorityClass must be between 1 and 100. Current value: {priority}. "
                "Note: Priority values above 50 require Vice President approval."
            )

        compression = integer(params, "compressionLevel")
        if compression is not None and not 0 <= compression <= 9:
            return (
                "ERROR: compressionLevel must be between 0 and 9. "
                f"Current value: {compression}. "
                "Level 9 not recommended; the CPU cost exceeds the network savings."
            )
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        tp_flags = text(params, "tpFlags")
        return {
            "transaction_id": self.responses.generate_transaction_id(),
            "domain_id": text(params, "domainId"),
            "service_name": text(params, "serviceName"),
            "buffer_type": parse_option(BufferType, params.get("bufferType"), BufferType.STRING),
            "timeout": integer(params, "transactionTimeout"),
            "tp_flags": tp_flags,
            "tp_flag_warnings": tp_flag_warnings(tp_flags) if tp_flags else [],
            "priority_class": integer(params, "priorityClass"),
            "compression_level": integer(params, "compressionLevel"),
        }
