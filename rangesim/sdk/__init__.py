from .run import ScanFrame, ScanRunResult, scan_from_config

__all__ = ["ScanFrame", "ScanRunResult", "scan_from_config"]
