"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- DoorService：門內容洗牌、主持人開門的選擇
- ResourceService：Game / Door 轉成帶 links 的 API 回應
"""
