"""
酒店预订系统 - 预订生命周期与房间可用性引擎
"""
