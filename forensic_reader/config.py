"""
Forensic Reader — Configuration: paths, constants, index aliases.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with FORENSIC_DATA_DIR env var for server deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("FORENSIC_DATA_DIR", str(Path.home() / "Desktop" / "Forensic Reader")))
BASE_FOLDER = _data_dir
INBOX_FOLDER = _data_dir / "inbox"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Decoding — export tools usually write UTF-8, often with a BOM
# ---------------------------------------------------------------------------
TEXT_ENCODING = os.environ.get("FORENSIC_TEXT_ENCODING", "utf-8-sig")

# ---------------------------------------------------------------------------
# Query / display constants
# ---------------------------------------------------------------------------
PAGE_SIZE = 100
TOP_VALUES_LIMIT = 10
EXPORT_INDEX_COLUMN = "_index"
EXPORT_FILE_PREFIX = "forensic-results"

# ---------------------------------------------------------------------------
# Known artifact exports: lower-cased alphanumeric file stem → index name
# ---------------------------------------------------------------------------
KNOWN_INDEXES = {
    "autorun": "AutoRun",
    "connecteddevices": "ConnectedDevices",
    "defenderexclusions": "DefenderExclusions",
    "dnscache": "DNSCache",
    "drivers": "Drivers",
    "installedsoftware": "InstalledSoftware",
    "ipconfiguration": "IPConfiguration",
    "localusers": "LocalUsers",
    "networkshare": "NetworkShare",
    "officeconnection": "OfficeConnection",
    "opentcpconnection": "OpenTCPConnection",
    "powershellhistory": "PowerShellHistory",
    "process": "Process",
    "remotelyopenedfiles": "RemotelyOpenedFiles",
    "runningservices": "RunningServices",
    "scheduledtasks": "ScheduledTasks",
    "scheduledtasksruninfo": "ScheduledTasksRunInfo",
    "securityevents": "SecurityEvents",
    "shadowcopy": "ShadowCopy",
    "smbshares": "SMBShares",
    "win32regrunkey": "Win32RegRunKey",
}
