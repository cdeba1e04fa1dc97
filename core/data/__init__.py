# -*- coding: utf-8 -*-
"""干支、时辰等基础数据"""
