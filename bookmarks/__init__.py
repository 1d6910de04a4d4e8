"""
Issue Bookmarks - GitHub Issues 驱动的书签站点数据流水线
"""
