"""Mainframe operations: COBOL copybooks and JCL batch jobs."""

import string
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.options import flag, integer, parse_option, text


class TargetEncoding(Enum):
    EBCDIC_037 = "EBCDIC_037"
    EBCDIC_500 = "EBCDIC_500"
    EBCDIC_1140 = "EBCDIC_1140"
    ASCII_IF_YOU_MUST = "ASCII_IF_YOU_MUST"


class PicClauseInterpretation(Enum):
    IBM_STRICT = "IBM_STRICT"
    IBM_RELAXED = "IBM_RELAXED"
    MICROFOCUS = "MICROFOCUS"
    GUESSWORK = "GUESSWORK"


class RedefinesStrategy(Enum):
    FIRST_WINS = "FIRST_WINS"
    LAST_WINS = "LAST_WINS"
    UNION_ALL = "UNION_ALL"
    PRAY = "PRAY"


class Level88HandlingMode(Enum):
    AS_ENUM = "AS_ENUM"
    AS_BOOLEAN = "AS_BOOLEAN"
    AS_MYSTERY = "AS_MYSTERY"


class CobolCopybookTool(EnterpriseTool):
    """Turn a COBOL copybook into JSON, FILLER fields and all."""

    name = "cobol-copybook-transform"
    description = (
        "Transform COBOL COPYBOOK definitions into modern JSON with full EBCDIC "
        "support. Handles COMP-3 packed decimals, REDEFINES and Level-88 conditions."
    )
    required = ("copybookSource",)
    required_hints = {
        "copybookSource": "Please provide the COBOL COPYBOOK source code.\n"
        "Hint: If you can't find it, check the tape library (row 47, shelf 3).",
    }
    parameters = {
        "copybookSource": "The COBOL COPYBOOK source code",
        "targetEncoding": "EBCDIC_037, EBCDIC_500, EBCDIC_1140 or ASCII_IF_YOU_MUST",
        "picClauseInterpretation": "IBM_STRICT, IBM_RELAXED, MICROFOCUS or GUESSWORK",
        "handleSignedPacked": "Handle COMP-3 signed packed decimal fields",
        "redefinesStrategy": "FIRST_WINS, LAST_WINS, UNION_ALL or PRAY",
        "occursDependingOnMode": "OCCURS DEPENDING ON handling mode",
        "level88HandlingMode": "AS_ENUM, AS_BOOLEAN or AS_MYSTERY",
    }
    interrupted_message = (
        "Transformation interrupted. COBOL doesn't like to be rushed.\n"
        "The mainframe has been notified. Please await further instructions."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "encoding": parse_option(
                TargetEncoding, params.get("targetEncoding"), TargetEncoding.EBCDIC_037
            ),
            "pic_mode": parse_option(
                PicClauseInterpretation,
                params.get("picClauseInterpretation"),
                PicClauseInterpretation.IBM_STRICT,
            ),
            "redefines": parse_option(
                RedefinesStrategy, params.get("redefinesStrategy"), RedefinesStrategy.FIRST_WINS
            ),
            "level88": parse_option(
                Level88HandlingMode,
                params.get("level88HandlingMode"),
                Level88HandlingMode.AS_ENUM,
            ),
            "signed_packed": flag(params, "handleSignedPacked"),
            "odo_mode": text(params, "occursDependingOnMode"),
            "cobol_output": self.responses.cobol_output(),
        }


def _job_letter(value: Any) -> str:
    """First letter of a job or message class, defaulting to A."""
    if isinstance(value, str) and value.strip():
        letter = value.strip()[0].upper()
        if letter in string.ascii_uppercase:
            return letter
    return "A"


class MainframeJclTool(EnterpriseTool):
    """Submit JCL to the batch queue and report whatever JES says."""

    name = "mainframe-jcl-submit"
    description = (
        "Submit a JCL job to the mainframe batch processing queue with full "
        "JES2/JES3 compatibility. Returns job ID and status."
    )
    required = ("jclSource",)
    required_hints = {
        "jclSource": "Please provide the JCL statements.\n"
        "Hint: Every JCL must start with //JOBNAME JOB...",
    }
    integer_params = ("priorityLevel", "regionSizeMB", "timeLimitMinutes", "tapeRetentionDays")
    parameters = {
        "jclSource": "JCL statements (//JOB card required)",
        "jobClass": "Job class: single letter A-Z",
        "msgClass": "Message class: single letter A-Z",
        "priorityLevel": "Priority level 0-15 (15 is highest)",
        "accountingInfo": "Accounting info for chargeback",
        "notifyUser": "TSO user ID for notification",
        "regionSizeMB": "Region size in megabytes",
        "timeLimitMinutes": "CPU time limit in minutes",
        "tapeRetentionDays": "Tape retention in days",
    }
    interrupted_message = (
        "Job submission interrupted. JES2 connection lost.\n"
        "Your JCL may or may not have been submitted. Please check SDSF."
    )

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        jcl = text(params, "jclSource") or ""
        if "//" not in jcl or "JOB" not in jcl.upper():
            return (
                "ERROR: Invalid JCL. //JOB card is required.\n"
                "JES2 Syntax: //jobname JOB (accounting),'programmer name'\n"
                "Please consult the JCL Reference Manual (3rd floor, cabinet 7)."
            )

        priority = integer(params, "priorityLevel")
        if priority is not None and not 0 <= priority <= 15:
            return (
                "ERROR: priorityLevel must be between 0 and 15. "
                f"Current value: {priority}.\n"
                "Note: Priority 15 requires director-level approval form JCL-847-B."
            )
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        status = self.responses.random_mainframe_status()
        priority = integer(params, "priorityLevel")
        return {
            "job_id": self.responses.generate_job_id(),
            "job_class": _job_letter(params.get("jobClass")),
            "msg_class": _job_letter(params.get("msgClass")),
            "priority": 8 if priority is None else priority,
            "accounting": text(params, "accountingInfo"),
            "notify_user": text(params, "notifyUser"),
            "region_mb": integer(params, "regionSizeMB"),
            "time_limit": integer(params, "timeLimitMinutes"),
            "tape_retention": integer(params, "tapeRetentionDays"),
            "status": status,
            "abended": "ABEND" in status,
        }
