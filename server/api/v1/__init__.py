# -*- coding: utf-8 -*-
"""v1 接口"""
