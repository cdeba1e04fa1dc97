# -*- coding: utf-8 -*-
"""排盘与历法计算"""
