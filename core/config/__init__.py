# -*- coding: utf-8 -*-
"""核心计算配置"""
