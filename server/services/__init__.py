# -*- coding: utf-8 -*-
"""业务服务层"""
