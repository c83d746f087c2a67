"""
aws_bill_audit - estimated monthly bill per EC2, RDS and ElastiCache resource.

Lists live resources, reads one week of CloudWatch CPU, looks up the
on-demand hourly price and prints month-to-date and full-month estimates.
"""

__version__ = "1.0.0"
