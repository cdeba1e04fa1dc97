# -*- coding: utf-8 -*-
"""K线结果标准化、校验、插值与洞察"""
