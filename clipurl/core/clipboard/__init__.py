"""Clipboard access"""

from .sampler import ClipboardSampler, SampleOutcome, SampleResult

__all__ = ['ClipboardSampler', 'SampleOutcome', 'SampleResult']
