"""Services — imperative shell around the core: persistence orchestration."""
