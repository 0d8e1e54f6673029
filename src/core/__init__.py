"""Core domain package for tabsweep.

Core contains URL normalization, grouping, selection and rule logic without
any browser- or storage-specific code, keeping the business logic portable.
"""
