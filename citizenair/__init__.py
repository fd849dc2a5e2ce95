"""CitizenAIR: crowdsourced air-quality ideas and their district word clouds."""

__version__ = "0.1.0"
