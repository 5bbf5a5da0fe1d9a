"""Ghostwire Runtime - executor invocation."""

from ghostwire.runtime.executor import Executor, ExecutionResult, HttpCliExecutor

__all__ = ["Executor", "ExecutionResult", "HttpCliExecutor"]
