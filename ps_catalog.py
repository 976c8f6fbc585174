#!/usr/bin/env python3
# ps_catalog.py · v0.1.0
"""
Static vocabularies for the synthetic PowerShell generators.

A catalog maps a category label ("Verbs", "FileSystem", ...) to an ordered
tuple of fragment strings, plus a label -> body table of pre-authored script
templates.  It is built once per process and never mutated; synthesizers pick
from it with the random source they are handed.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

__version__ = "0.1.0"


class CatalogError(ValueError):
    """Raised when a catalog is built from empty or malformed pools."""


# ──────────────────────────────────────────────────────────────
# Vocabularies
# ──────────────────────────────────────────────────────────────

NAME_POOLS: Dict[str, Sequence[str]] = {
    "Verbs": (
        "Get", "Set", "New", "Remove", "Invoke", "Test", "Start", "Stop",
        "Update", "Import", "Export", "Convert", "Find", "Register", "Sync",
        "Backup", "Restore", "Measure", "Resolve", "Publish",
    ),
    "Nouns": (
        "Item", "Config", "Service", "Log", "Report", "Backup", "User",
        "Session", "Share", "Package", "Certificate", "Endpoint", "Inventory",
        "Schedule", "Snapshot", "Metric", "Profile", "Record", "Queue", "Cache",
    ),
    "ClassSuffixes": (
        "Manager", "Handler", "Provider", "Collector", "Client", "Store",
        "Builder", "Watcher", "Resolver", "Validator",
    ),
    "ParameterNames": (
        "Path", "Name", "ComputerName", "Credential", "TimeoutSeconds", "Force",
        "Filter", "Destination", "Port", "Retry", "LogPath", "Recurse",
        "InputObject", "Threshold", "Tag",
    ),
    "Types": (
        "[string]", "[int]", "[bool]", "[datetime]", "[string[]]", "[hashtable]",
        "[switch]", "[pscredential]", "[System.IO.FileInfo]", "[double]",
        "[uri]", "[object[]]",
    ),
    "Validations": (
        "[ValidateNotNullOrEmpty()]",
        "[ValidateRange(1, 100)]",
        "[ValidateSet('Low', 'Medium', 'High')]",
        "[ValidatePattern('^[A-Za-z0-9_-]+$')]",
        "[ValidateScript({ Test-Path -Path $_ })]",
        "[ValidateLength(1, 64)]",
        "[ValidateCount(1, 10)]",
    ),
    "Usings": (
        "System.Collections.Generic",
        "System.IO",
        "System.Text",
        "System.Net",
        "System.Management.Automation",
        "System.Security.Cryptography",
    ),
    "PropertyTypes": (
        "[string]", "[int]", "[bool]", "[datetime]", "[hashtable]",
        "[System.Collections.Generic.List[string]]", "[double]",
    ),
    "Synopses": (
        "Collects diagnostic data from the target system.",
        "Rotates and archives stale log files.",
        "Validates configuration against the baseline.",
        "Synchronizes inventory records with the central store.",
        "Checks service health and restarts failed instances.",
        "Exports usage metrics to a CSV report.",
        "Cleans up temporary artifacts older than the retention window.",
        "Provisions user sessions for the remote endpoint.",
        "Überprüft Zertifikate auf Ablaufdaten.",
    ),
    "NoteLines": (
        "Requires administrative privileges.",
        "Tested on Windows PowerShell 5.1 and PowerShell 7.",
        "Output objects are suitable for the pipeline.",
        "Verbose output is available with -Verbose.",
        "Legacy behaviour kept for compatibility – do not remove.",
        "Author: automation team",
    ),
}

OPERATION_POOLS: Dict[str, Sequence[str]] = {
    "FileSystem": (
        "$items = Get-ChildItem -Path $env:TEMP -Recurse -File -ErrorAction SilentlyContinue",
        "$large = $items | Where-Object { $_.Length -gt 10MB }",
        "New-Item -Path $env:TEMP -Name 'staging' -ItemType Directory -Force | Out-Null",
        "Copy-Item -Path (Join-Path $env:TEMP 'input.txt') -Destination $env:TEMP -Force",
        "$content = Get-Content -Path (Join-Path $PSScriptRoot 'settings.json') -Raw",
        "Remove-Item -Path (Join-Path $env:TEMP '*.tmp') -Force -ErrorAction SilentlyContinue",
        "$hash = Get-FileHash -Path $PSCommandPath -Algorithm SHA256",
        "Set-Content -Path (Join-Path $env:TEMP 'output.log') -Value (Get-Date -Format o)",
        "Compress-Archive -Path (Join-Path $env:TEMP 'staging') -DestinationPath (Join-Path $env:TEMP 'staging.zip') -Force",
    ),
    "Network": (
        "$ping = Test-Connection -ComputerName 'localhost' -Count 2 -Quiet",
        "$response = Invoke-RestMethod -Uri 'https://api.example.com/status' -Method Get",
        "$dns = Resolve-DnsName -Name 'example.com' -ErrorAction SilentlyContinue",
        "$port = Test-NetConnection -ComputerName 'localhost' -Port 443 -InformationLevel Quiet",
        "$adapters = Get-NetAdapter | Where-Object { $_.Status -eq 'Up' }",
        "$page = Invoke-WebRequest -Uri 'https://www.example.com' -UseBasicParsing",
        "$ip = (Get-NetIPAddress -AddressFamily IPv4 | Select-Object -First 1).IPAddress",
    ),
    "Process": (
        "$procs = Get-Process | Sort-Object -Property CPU -Descending | Select-Object -First 5",
        "$svc = Get-Service -Name 'Spooler' -ErrorAction SilentlyContinue",
        "Start-Process -FilePath 'notepad.exe' -WindowStyle Hidden",
        "Stop-Process -Name 'notepad' -Force -ErrorAction SilentlyContinue",
        "$job = Start-Job -ScriptBlock { Get-Date }",
        "$result = Receive-Job -Job $job -Wait -AutoRemoveJob",
        "Restart-Service -Name 'W32Time' -Force -ErrorAction SilentlyContinue",
    ),
    "Registry": (
        "$key = Get-ItemProperty -Path 'HKLM:\\SOFTWARE\\Microsoft\\Windows\\CurrentVersion'",
        "New-Item -Path 'HKCU:\\Software\\Synthetic' -Force | Out-Null",
        "Set-ItemProperty -Path 'HKCU:\\Software\\Synthetic' -Name 'LastRun' -Value (Get-Date)",
        "$value = (Get-ItemProperty -Path 'HKCU:\\Software\\Synthetic').LastRun",
        "Remove-ItemProperty -Path 'HKCU:\\Software\\Synthetic' -Name 'Obsolete' -ErrorAction SilentlyContinue",
        "$exists = Test-Path -Path 'HKLM:\\SOFTWARE\\Policies'",
    ),
    "Security": (
        "$cred = Get-Credential -Message 'Enter service account credentials'",
        "$secure = ConvertTo-SecureString -String 'placeholder' -AsPlainText -Force",
        "$acl = Get-Acl -Path $env:TEMP",
        "$certs = Get-ChildItem -Path Cert:\\LocalMachine\\My | Where-Object { $_.NotAfter -lt (Get-Date).AddDays(30) }",
        "$policy = Get-ExecutionPolicy -Scope CurrentUser",
        "$principal = [Security.Principal.WindowsPrincipal][Security.Principal.WindowsIdentity]::GetCurrent()",
    ),
    "Data": (
        "$rows = Import-Csv -Path (Join-Path $PSScriptRoot 'data.csv')",
        "$rows | Export-Csv -Path (Join-Path $env:TEMP 'report.csv') -NoTypeInformation",
        "$json = $rows | ConvertTo-Json -Depth 4",
        "$grouped = $rows | Group-Object -Property Category",
        "$stats = $rows | Measure-Object -Property Amount -Sum -Average",
        "$table = @{ Created = Get-Date; Count = $rows.Count }",
        "$xml = [xml](Get-Content -Path (Join-Path $PSScriptRoot 'config.xml') -Raw)",
    ),
}

SCRIPT_TEMPLATES: Dict[str, str] = {
    "LogRotation": """param(
    [string]$LogPath = '__LOG_PATH__',
    [int]$RetentionDays = __THRESHOLD__
)

$cutoff = (Get-Date).AddDays(-$RetentionDays)
Get-ChildItem -Path $LogPath -Filter '*.log' |
    Where-Object { $_.LastWriteTime -lt $cutoff } |
    ForEach-Object {
        Write-Verbose "Archiving $($_.Name)"
        Compress-Archive -Path $_.FullName -DestinationPath "$($_.FullName).zip" -Force
        Remove-Item -Path $_.FullName -Force
    }
Write-Output "__FUNCTION__ completed for $LogPath"
""",
    "ServiceMonitor": """$services = @('__SERVICE__', 'W32Time')
foreach ($name in $services) {
    $svc = Get-Service -Name $name -ErrorAction SilentlyContinue
    if ($null -eq $svc) {
        Write-Warning "Service $name not found on __SERVER__"
        continue
    }
    if ($svc.Status -ne 'Running') {
        Start-Service -Name $name
        Write-Output "Restarted $name"
    }
}
""",
    "DiskReport": """$threshold = __THRESHOLD__
$report = Get-PSDrive -PSProvider FileSystem | ForEach-Object {
    [pscustomobject]@{
        Drive   = $_.Name
        FreeGB  = [math]::Round($_.Free / 1GB, 2)
        UsedGB  = [math]::Round($_.Used / 1GB, 2)
        Warning = ($_.Free / 1GB) -lt $threshold
    }
}
$report | Export-Csv -Path '__LOG_PATH__\\disk-report.csv' -NoTypeInformation
""",
    "UserAudit": """Import-Module ActiveDirectory -ErrorAction Stop
$stale = Search-ADAccount -AccountInactive -TimeSpan (New-TimeSpan -Days __THRESHOLD__) -UsersOnly
foreach ($user in $stale) {
    Write-Output ("{0} last logged on {1}" -f $user.SamAccountName, $user.LastLogonDate)
}
$stale | Select-Object SamAccountName, LastLogonDate |
    Export-Csv -Path '__LOG_PATH__\\stale-users.csv' -NoTypeInformation
""",
    "BackupJob": """function __FUNCTION__ {
    param([string]$Source = '__LOG_PATH__', [string]$Target = '\\\\__SERVER__\\backup')
    $stamp = Get-Date -Format 'yyyyMMdd_HHmmss'
    $dest = Join-Path $Target $stamp
    New-Item -Path $dest -ItemType Directory -Force | Out-Null
    robocopy $Source $dest /MIR /R:__THRESHOLD__ /NFL /NDL | Out-Null
    Write-Output "Backup written to $dest"
}

__FUNCTION__
""",
}

REQUIRED_CATEGORIES: Tuple[str, ...] = tuple(NAME_POOLS)

# tokens a template body may carry; the template assembler fills exactly these
PLACEHOLDER = re.compile(r"__([A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*)__")
TEMPLATE_KEYS = frozenset({"FUNCTION", "LOG_PATH", "THRESHOLD", "SERVER", "SERVICE"})

# labels and operation categories end up in filenames
FILE_LABEL = re.compile(r"\w+")

# ──────────────────────────────────────────────────────────────
# Catalog
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TemplateCatalog:
    pools: Mapping[str, Tuple[str, ...]]
    templates: Mapping[str, str]
    operation_categories: Tuple[str, ...]

    def fragments(self, category: str) -> Tuple[str, ...]:
        return self.pools[category]

    def pick(self, rng: random.Random, category: str) -> str:
        return rng.choice(self.pools[category])

    def template(self, label: str) -> str:
        return self.templates[label]

    @property
    def template_labels(self) -> Tuple[str, ...]:
        return tuple(self.templates)


def _freeze_pool(category: str, pool: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(pool, str) or not isinstance(pool, Iterable):
        raise CatalogError(f"Pool {category!r} must be a list of strings")
    frozen = tuple(pool)
    if not frozen:
        raise CatalogError(f"Pool {category!r} is empty")
    for fragment in frozen:
        if not isinstance(fragment, str) or not fragment:
            raise CatalogError(f"Pool {category!r} holds a non-string or blank fragment")
    return frozen


def build_catalog(
    names: Mapping[str, Iterable[str]],
    operations: Mapping[str, Iterable[str]],
    templates: Optional[Mapping[str, str]] = None,
) -> TemplateCatalog:
    """Validate and freeze the given pools into a catalog.

    Every name category in REQUIRED_CATEGORIES must be present, every pool
    non-empty, every operation fragment a single line.  Template labels and
    operation categories must be plain words (they become filenames) and
    template bodies may only use TEMPLATE_KEYS placeholders.  Violations raise
    CatalogError here so generation never meets a bad pool or template.
    """
    missing = [c for c in REQUIRED_CATEGORIES if c not in names]
    if missing:
        raise CatalogError(f"Missing categories: {', '.join(missing)}")
    if not operations:
        raise CatalogError("At least one operation category is required")

    pools: Dict[str, Tuple[str, ...]] = {}
    for category, pool in names.items():
        pools[category] = _freeze_pool(category, pool)
    for category, pool in operations.items():
        if category in pools:
            raise CatalogError(f"Duplicate category: {category}")
        if not isinstance(category, str) or not FILE_LABEL.fullmatch(category):
            raise CatalogError(f"Operation category {category!r} must be a plain word")
        frozen = _freeze_pool(category, pool)
        if any("\n" in op for op in frozen):
            raise CatalogError(f"Operations in {category!r} must be single lines")
        pools[category] = frozen

    bodies = dict(SCRIPT_TEMPLATES if templates is None else templates)
    if not bodies:
        raise CatalogError("At least one script template is required")
    for label, body in bodies.items():
        if not isinstance(label, str) or not FILE_LABEL.fullmatch(label):
            raise CatalogError(f"Template label {label!r} must be a plain word")
        if not isinstance(body, str) or not body.strip():
            raise CatalogError(f"Template {label!r} is empty")
        unknown = sorted(set(PLACEHOLDER.findall(body)) - TEMPLATE_KEYS)
        if unknown:
            raise CatalogError(f"Template {label!r} has unknown placeholders: {', '.join(unknown)}")

    return TemplateCatalog(
        pools=MappingProxyType(pools),
        templates=MappingProxyType(bodies),
        operation_categories=tuple(operations),
    )


def default_catalog() -> TemplateCatalog:
    return build_catalog(NAME_POOLS, OPERATION_POOLS, SCRIPT_TEMPLATES)
