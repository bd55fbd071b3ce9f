"""
Acompanha - Longitudinal Clinical Monitoring

Risk evaluation and recovery scoring for weekly athlete check-ins.
"""
__version__ = "1.0.0"
