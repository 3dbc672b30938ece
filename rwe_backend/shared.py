"""Backend-facing alias for shared utilities."""

from __future__ import annotations

import rwe_shared as _root_shared

Result = _root_shared.Result
ErrorCode = _root_shared.ErrorCode
get_logger = _root_shared.get_logger
log_success = _root_shared.log_success
log_structured = _root_shared.log_structured
request_id_var = _root_shared.request_id_var
extension_token = _root_shared.extension_token
public_error_message = _root_shared.public_error_message
mask_paths = _root_shared.mask_paths
configure_logging = _root_shared.configure_logging
timer = _root_shared.timer

__all__ = _root_shared.__all__
